"""Qt presentation layer for the admin workstation."""
