"""Adapters binding the domain ports to router APIs and the hosts file."""
