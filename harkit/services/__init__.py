"""Analysis services: response extraction, schema inference and screen scans."""
