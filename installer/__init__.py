"""wp-admin theme installer."""
