"""LingoNotes: sentence sheets, AI translation, subscriptions and sync."""
