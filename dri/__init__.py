"""
dri: a terminal dashboard for Drone CI

Browse repositories, inspect build history and read per-step build logs
without leaving the terminal.

Run it with:
    $ dri --server https://drone.example.com --token <token>
"""

__version__ = "0.1.0"
