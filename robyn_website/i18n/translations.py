from typing import Dict

DEFAULT_LANGUAGE = 'de'

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    'de': {
        'site_title': 'Website Vorlage',
        'please_select': 'Bitte auswählen',
        'entries': 'Einträge',
        'entry': 'Eintrag',
        'records': 'Datensätze',
        'pages': 'Seiten',
        'page': 'Seite',
        'jump_back': 'Rückwärts blättern',
        'jump_back_fast': 'schnell Rückwärts blättern',
        'jump_forward': 'Vorwärts blättern',
        'jump_forward_fast': 'schnell Vorwärts blättern',
        'last_update': 'Letzte Aktualisierung',
        'not_found': 'Seite nicht gefunden',
        'language_changed': 'Sprache geändert',
    },
    'fr': {
        'site_title': 'Modèle de site web',
        'please_select': 'Veuillez choisir',
        'entries': 'inscriptions',
        'entry': 'inscription',
        'records': 'enregistrements',
        'pages': 'pages',
        'page': 'page',
        'jump_back': 'page précédente',
        'jump_back_fast': 'reculer rapidement',
        'jump_forward': 'page suivante',
        'jump_forward_fast': 'avancer rapidement',
        'last_update': 'Dernière mise à jour',
        'not_found': 'Page introuvable',
        'language_changed': 'Langue modifiée',
    },
    'it': {
        'site_title': 'Modello di sito web',
        'please_select': 'Si prega di selezionare',
        'entries': 'iscrizioni',
        'entry': 'iscrizione',
        'records': 'record',
        'pages': 'pagine',
        'page': 'pagina',
        'jump_back': 'pagina precedente',
        'jump_back_fast': 'indietro veloce',
        'jump_forward': 'pagina successiva',
        'jump_forward_fast': 'avanti veloce',
        'last_update': 'Ultimo aggiornamento',
        'not_found': 'Pagina non trovata',
        'language_changed': 'Lingua cambiata',
    },
    'en': {
        'site_title': 'Website Template',
        'please_select': 'Please select',
        'entries': 'entries',
        'entry': 'entry',
        'records': 'records',
        'pages': 'pages',
        'page': 'page',
        'jump_back': 'previous pages',
        'jump_back_fast': 'fast backward',
        'jump_forward': 'next pages',
        'jump_forward_fast': 'fast forward',
        'last_update': 'Last update',
        'not_found': 'Page not found',
        'language_changed': 'Language changed',
    },
}


def get_text(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """获取翻译文本, 找不到时依次回退到默认语言和键本身"""
    texts = TRANSLATIONS.get(language) or TRANSLATIONS[DEFAULT_LANGUAGE]
    if key in texts:
        return texts[key]
    return TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)
