"""Script detection, phoneme tokenization and phonological features."""
