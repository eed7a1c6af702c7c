"""todogate — a task-list store behind bearer-token authentication.

Clients register and log in with a name/password pair, receive a
signed JWT, and present it to create, read, update, or delete items.
"""

__version__ = "0.1.0"
