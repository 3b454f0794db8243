"""EDP admin console core: CD pipelines, stages and their cluster resources."""

__version__ = "0.1.0"
