"""Core layer: settings, result types, errors and dependency container."""
