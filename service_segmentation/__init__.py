"""Audience segmentation engine for the marketing CRM dashboard."""
