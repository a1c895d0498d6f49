"""Bilingual content site for a volunteer fire brigade."""
