"""AI pipeline: prompt construction, model calls, normalization and scoring."""
