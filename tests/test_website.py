from robyn_website.core.config import SiteConfig
from robyn_website.core.request import RequestContext
from robyn_website.core.website import Website


def test_path_parts(make_request, config):
    web = Website(make_request('http://www.example.com/library/global.html?x=1'), config)
    assert web.host == 'www.example.com'
    assert web.path == '/library/global.html'
    assert web.page == 'global.html'
    assert web.dir == '/library'
    assert web.query == 'x=1'
    assert web.page_title == 'Test Site'


def test_root_path(make_request):
    web = Website(make_request('/'))
    assert web.page == ''
    assert web.dir == '/'
    assert web.query is None


def test_no_path():
    web = Website(RequestContext())
    assert web.path is None
    assert web.page is None
    assert web.dir is None


def test_add_query_merges_and_stores(make_request):
    web = Website(make_request('/list.html?a=1&b=2'))
    assert web.add_query({'b': 3, 'c': 'x y'}) == '?a=1&amp;b=3&amp;c=x+y'
    assert web.query == 'a=1&b=3&c=x+y'
    assert web.add_query({'a': 5}) == '?a=5&amp;b=3&amp;c=x+y'


def test_add_query_without_existing_query(make_request):
    web = Website(make_request('/list.html'))
    assert web.add_query({'pgNav': 2}) == '?pgNav=2'


def test_add_query_with_only_empty_values(make_request):
    web = Website(make_request('/list.html'))
    assert web.add_query({'pgNav': None}) == ''
    assert web.query is None


def test_web_and_doc_root(make_request):
    web = Website(make_request('/'), SiteConfig(web_root='/dev', doc_root='/var/www'))
    assert web.web_root == '/dev/'
    web.set_doc_root('dev/')
    assert web.doc_root == '/var/www/dev'
    web.set_web_root('/')
    assert web.web_root == '/'


def test_last_page(make_request):
    session = {}
    web = Website(make_request('/list.html?page=3'))
    assert web.get_last_page(session) is None
    web.set_last_page(session)
    assert web.get_last_page(session) == '/list.html?page=3'
    web.set_last_page(session, '/other.html', namespace='Admin')
    assert web.get_last_page(session, 'Admin') == '/other.html'
    web.reset_last_page(session)
    assert web.get_last_page(session) is None
    assert session == {'Web': {}, 'Admin': {'back_page': '/other.html'}}
