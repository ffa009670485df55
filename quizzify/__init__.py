"""
Quizzify - a Discord quiz app with categories, scored sessions and screen navigation.
"""
