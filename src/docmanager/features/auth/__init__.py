"""Auth feature: sessions, login and the password reset lifecycle."""
