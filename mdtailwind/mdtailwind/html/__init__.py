"""HTML output: splicing into rendered pages and CDN reference fragments."""
