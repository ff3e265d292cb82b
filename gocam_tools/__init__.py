"""GO-CAM causal-activity model analysis toolkit."""

__version__ = "0.3.0"
