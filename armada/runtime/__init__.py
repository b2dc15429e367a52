"""Runtime primitives shared by game modules: logging, error policy, scheduling."""
