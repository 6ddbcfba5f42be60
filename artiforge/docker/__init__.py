"""Container image building, pushing and manifest composition."""
