"""Sub-command groups registered on the main ``nixdots`` CLI."""
