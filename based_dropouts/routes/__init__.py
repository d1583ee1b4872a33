"""HTTP routes for the Based Dropouts site."""
