"""Small helpers shared across CineSocial modules."""
