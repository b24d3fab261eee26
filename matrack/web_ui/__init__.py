"""NiceGUI browser client for the asset-tracking API."""
