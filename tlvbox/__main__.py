from tlvbox.cli import main

main()
