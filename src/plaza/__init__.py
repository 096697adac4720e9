"""Plaza: social content backend with moderated posts and a mirrored social graph."""
