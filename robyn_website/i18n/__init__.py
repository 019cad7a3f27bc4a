from .translations import get_text, TRANSLATIONS

__all__ = ['get_text', 'TRANSLATIONS']
