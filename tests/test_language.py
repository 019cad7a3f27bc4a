from robyn_website.core.language import Language
from robyn_website.core.language_menu import LanguageMenu
from robyn_website.core.website import Website


def test_header_languages_sorted_by_quality():
    languages = Language.get_header_languages('de;q=0.2, en-ca, en;q=0.8, en-us;q=0.6')
    assert list(languages.items()) == [('en-ca', 1.0), ('en', 0.8), ('en-us', 0.6), ('de', 0.2)]
    assert Language.get_header_languages(None) == {}


def test_from_header(make_request):
    language = Language()
    assert language.from_header(make_request('/', headers={'Accept-Language': 'es, fr-CH;q=0.9'})) == 'fr'
    assert language.from_header(make_request('/', headers={'Accept-Language': 'es'})) is None


def test_auto_detect_order(make_request):
    language = Language()
    headers = {'Accept-Language': 'it', 'Cookie': 'lang=en'}
    assert language.auto_detect(make_request('/fr/page-de.html?lang=e"n', headers=headers)) == 'en'
    assert language.auto_detect(make_request('/fr/page-de.html', headers=headers)) == 'fr'
    assert language.auto_detect(make_request('/page-de.html', headers=headers)) == 'de'
    assert language.auto_detect(make_request('/page.html', headers=headers)) == 'en'
    assert language.auto_detect(make_request('/page.html', headers={'Accept-Language': 'it'})) == 'it'
    assert language.auto_detect(make_request('/page.html?lang=xx')) is None
    assert language.auto_detect(None) is None


def test_auto_set(make_request):
    language = Language()
    cookie = language.auto_set(make_request('http://www.example.com/page.html?lang=fr'))
    assert language.get() == 'fr'
    assert cookie.startswith('lang=fr; Max-Age=31536000; Path=/; Domain=.example.com')
    assert cookie.endswith('HttpOnly; SameSite=Strict')

    assert language.auto_set(make_request('/page.html'), save=False) is None
    assert language.get() == 'de'


def test_create_page():
    language = Language()
    language.set('fr')
    assert language.create_page('mypage.html') == 'mypage-fr.html'
    assert language.create_page('mypage-fr.html', 'de') == 'mypage.html'
    assert language.create_page('mypage-fr.html', 'it') == 'mypage-it.html'
    assert language.create_page('report.pdf', 'en') == 'report-en.pdf'


def test_custom_languages(config):
    language = Language.from_config(config)
    assert language.is_valid('de')
    assert not language.is_valid('es')
    assert not language.is_valid(None)


def test_language_menu(tmp_path, make_request, config):
    (tmp_path / 'about.html').write_text('about')
    (tmp_path / 'about-fr.html').write_text('about fr')
    config.doc_root = str(tmp_path)
    config.language_query_whitelist = ['page']
    web = Website(make_request('/about.html?page=2&secret=1'), config)
    language = Language.from_config(config)
    language.set('de')

    html = LanguageMenu(language, web).render()
    assert html.startswith('<ul class="nav">')
    assert '<li class="navActive">DE</li>' in html
    assert '<a href="/about-fr.html?page=2&amp;lang=fr" title="Français">FR</a>' in html
    assert ('<a href="/index.html?page=2&amp;lang=it&amp;url=%2Fabout-it.html" title="Italiano">IT</a>'
            in html)
    assert 'secret' not in html


def test_language_menu_labels(tmp_path, make_request, config):
    config.doc_root = str(tmp_path)
    web = Website(make_request('/index.html'), config)
    language = Language.from_config(config)
    language.set('en')
    menu = LanguageMenu(language, web)
    menu.use_label = True
    menu.css_id = 'langNav'
    html = menu.render()
    assert html.startswith('<ul id="langNav" class="nav">')
    assert '<li class="navActive">English</li>' in html
    assert '>Deutsch</a>' in html
