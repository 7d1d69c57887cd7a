"""Raw dataset access and shared record types."""
