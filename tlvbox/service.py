import argparse
import sys

import uvicorn

from tlvbox.service_app import create_app, ServiceSettings


class InspectionServer:
    def __init__(self, settings: ServiceSettings) -> None:
        self.settings = settings
        self.app = create_app(settings=self.settings)

    def start(self) -> None:
        uvicorn.run(
            self.app,
            host=self.settings.server_ip,
            port=self.settings.server_port,
            log_level=self.settings.log_level.lower(),
        )


def main():
    parser = argparse.ArgumentParser(description="Start the TLV inspection server.")
    parser.add_argument("--ip", type=str, default="127.0.0.1", help="IP address to bind the server to.")
    parser.add_argument("--port", type=int, default=10290, help="Port to run the server on.")
    args = parser.parse_args()
    server = InspectionServer(ServiceSettings(server_ip=args.ip, server_port=args.port))
    server.start()


if __name__ == "__main__":
    sys.exit(main())
