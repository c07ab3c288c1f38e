"""Build orchestration: change manifest, staged pipeline, output writing."""
