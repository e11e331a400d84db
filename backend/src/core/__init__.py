"""
Shared configuration, logging and record models.
"""
