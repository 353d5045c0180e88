"""
Pool admin command gateway.

Receives JSON commands on the API unix socket, forwards them to the sibling
process that owns them and answers with a fixed result/error/response
envelope.
"""

__version__ = "1.0.0"
