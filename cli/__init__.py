"""Command line interface for the beehive sync job."""
