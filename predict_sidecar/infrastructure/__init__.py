"""
Infrastructure Layer

Adapters behind the domain ports: the TensorFlow runtime, the filesystem
model registry, the in-memory recorder and the scoring scheduler.
"""
