from ddt import ddt, data, unpack
from unittest import TestCase

from urllib3 import HTTPHeaderDict

from caching_proxy import util


@ddt
class TestStatusClasses(TestCase):
    @data(
        (199, False, False),
        (200, True, False),
        (204, True, False),
        (299, True, False),
        (300, False, True),
        (302, False, True),
        (399, False, True),
        (404, False, False),
        (500, False, False),
    )
    @unpack
    def test_classification(self, status, success, redirect):
        self.assertEqual(success, util.is_success(status))
        self.assertEqual(redirect, util.is_redirect(status))


@ddt
class TestStripOrigin(TestCase):
    @data(
        ('http://o/a', 'http://o', '/a'),
        ('http://o/a?b=c', 'http://o', '/a?b=c'),
        ('http://o', 'http://o', '/'),
        ('http://o/', 'http://o', '/'),
        ('http://o?x=1', 'http://o', '?x=1'),
        ('http://o/a', 'http://o/', '/a'),
        # Another host that merely shares a prefix with the origin.
        ('http://other/a', 'http://o', 'http://other/a'),
        ('https://o/a', 'http://o', 'https://o/a'),
        # An origin with a path: stripping would lose the prefix.
        ('http://o/api/final', 'http://o/api', 'http://o/api/final'),
        ('http://o/api', 'http://o/api', 'http://o/api'),
    )
    @unpack
    def test_strip_origin(self, url, origin, expected):
        self.assertEqual(expected, util.strip_origin(url, origin))


class TestEndToEndHeaders(TestCase):
    def test_drops_hop_by_hop_headers(self):
        headers = HTTPHeaderDict()
        headers.add('Content-Type', 'text/plain')
        headers.add('Transfer-Encoding', 'chunked')
        headers.add('Keep-Alive', 'timeout=5')
        headers.add('Connection', 'keep-alive, X-Private')
        headers.add('X-Private', 'secret')
        headers.add('Set-Cookie', 'a=1')
        headers.add('Set-Cookie', 'b=2')

        result = util.end_to_end_headers(headers)

        self.assertEqual(
            [('Content-Type', 'text/plain'), ('Set-Cookie', 'a=1'), ('Set-Cookie', 'b=2')],
            list(result.iteritems()))

    def test_excludes_given_headers_case_insensitively(self):
        headers = HTTPHeaderDict({'Host': 'proxy:3000', 'content-length': '3', 'Accept': '*/*'})

        result = util.end_to_end_headers(headers, exclude=('host', 'Content-Length'))

        self.assertEqual([('Accept', '*/*')], list(result.iteritems()))

    def test_does_not_modify_input(self):
        headers = HTTPHeaderDict({'Connection': 'close'})
        util.end_to_end_headers(headers)
        self.assertEqual('close', headers['Connection'])

