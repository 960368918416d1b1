"""Document backends: static HTML (lxml) and live browser tabs (CDP)."""
