"""External collaborators of the auth controllers."""
