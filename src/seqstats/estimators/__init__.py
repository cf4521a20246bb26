"""Batch estimators over raw samples and histograms."""
