"""Client-side review of generated flashcards."""
