"""devdash: GitHub pull requests, issues, and local git state for the current repository."""
