"""Fito outfit engine: occasion-driven outfit selection from a user's wardrobe."""
