"""Language-specific declaration generators."""
