"""Identity application layer: orchestration of account workflows."""
