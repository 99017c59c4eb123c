"""
Pipelines: Kubeflow Pipelines (KFP v2) components and pipeline definitions
for offline batch ingestion of web pages.
"""
