"""Low-level binary helpers shared by the codec layers."""
