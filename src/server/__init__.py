"""FastAPI server for creating Zoom meetings through S2S or user-level OAuth."""

__version__ = "1.0.0"
