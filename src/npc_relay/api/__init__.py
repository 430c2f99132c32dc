"""HTTP gateway: FastAPI app, request/response models, and routes."""
