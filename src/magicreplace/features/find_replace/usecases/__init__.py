"""Use cases orchestrating the find & replace workflow."""
