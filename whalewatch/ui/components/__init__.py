"""Chart widgets."""
