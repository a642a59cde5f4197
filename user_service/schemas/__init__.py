"""Wire Schemas: Pydantic request/response models for the RPC surface."""
