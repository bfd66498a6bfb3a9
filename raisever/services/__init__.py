"""Release services built on top of the git transaction."""
