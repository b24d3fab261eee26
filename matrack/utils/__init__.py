"""Cross-cutting helpers (logging setup, runtime configuration)."""
