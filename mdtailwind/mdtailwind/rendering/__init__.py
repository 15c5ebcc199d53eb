"""Document rendering: front matter, Markdown, templates and hooks."""
