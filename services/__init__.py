"""I/O collaborators: HTTP fetching and LINE event handling."""
