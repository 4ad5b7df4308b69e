"""CLI commands for ghupload."""
