"""
Domain Layer

Entities, domain services (scaling and series buffering) and the ports the
sidecar consumes. Nothing here depends on FastAPI or TensorFlow.
"""
