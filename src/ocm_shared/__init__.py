"""Shared configuration, logging and data models for the OCM dashboard."""
