"""
predict-sidecar

Rolling-window scoring service: buffers labeled time series, feeds min-max
scaled windows to pre-trained forecasting models and republishes the
denormalized predictions as new series points.
"""

__version__ = "0.1.0"
