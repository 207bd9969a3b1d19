"""Core domain logic for ProjectDesk: persistence, project CRUD and analysis."""
