"""
Core launcher engine for orchestrating the install-and-launch pipeline.

The `Orchestrator` sequences the stages, delegating the game start itself
to the `LaunchController`.
"""
