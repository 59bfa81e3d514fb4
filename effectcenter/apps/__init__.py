"""Demo applications built on effectcenter."""
