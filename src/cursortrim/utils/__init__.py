"""Logging and file helpers shared by the command-line front end."""
