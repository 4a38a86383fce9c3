"""Terminal coach that compiles, runs and tracks small Rust exercises."""

__version__ = "0.1.0"