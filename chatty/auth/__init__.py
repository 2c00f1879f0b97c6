"""Session tokens and the gates that check them on protected routes."""
