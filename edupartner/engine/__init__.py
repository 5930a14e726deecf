"""Engagement scoring, segmentation and campaign dispatch."""
