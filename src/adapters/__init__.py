"""Adapters: pypdf sources, HTTP, HTML/PDF rendering and exporters."""
