"""Command line front end for the termkit prompts."""
