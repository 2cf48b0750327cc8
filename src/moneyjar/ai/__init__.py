"""Generative-AI helpers: receipt scanning, categorisation, voice entry and advice."""
