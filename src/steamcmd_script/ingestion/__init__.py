"""
Ingestion of the owned and shared game lists.
"""
