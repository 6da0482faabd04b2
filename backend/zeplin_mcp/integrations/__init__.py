"""External collaborators: Zeplin REST API, link resolution, asset downloads."""
