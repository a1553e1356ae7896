"""Domain Layer: the CMS data model, error taxonomy and the ports (interfaces)
that infrastructure adapters implement."""
