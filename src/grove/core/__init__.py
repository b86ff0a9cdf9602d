"""Grove core: settings resolution, hooks and shared utilities."""
