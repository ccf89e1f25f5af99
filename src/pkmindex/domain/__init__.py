"""Domain layer — note models, scanners and the note parser."""
