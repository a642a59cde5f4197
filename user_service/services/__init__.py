"""Services Layer: the request handler sitting between the RPC routes and the store."""
