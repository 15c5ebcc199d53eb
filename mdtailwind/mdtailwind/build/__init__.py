"""Tailwind build pipeline: boilerplate, toolchain, orchestration, cleanup."""
