"""Adapters: Discord gateway and webhook backend."""
