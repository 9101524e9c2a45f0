from ddt import ddt, data, unpack
import hashlib
from unittest import TestCase

from caching_proxy.key import derive_key, key_for
from caching_proxy.model import Request


EMPTY_DIGEST = hashlib.sha256(b'').hexdigest()


@ddt
class TestDeriveKey(TestCase):
    @data(
        ('GET', '/a', None, 'GET|/a'),
        ('GET', '/a?b=c&d=e', None, 'GET|/a?b=c&d=e'),
        ('POST', '/a', b'', 'POST|/a|' + EMPTY_DIGEST),
        ('POST', '/a', b'hello', 'POST|/a|2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'),
    )
    @unpack
    def test_format(self, method, path, body, expected):
        self.assertEqual(expected, derive_key(method, path, body))

    def test_is_deterministic(self):
        self.assertEqual(derive_key('POST', '/a', b'{"x": 1}'), derive_key('POST', '/a', b'{"x": 1}'))

    def test_distinct_bodies_give_distinct_keys(self):
        self.assertNotEqual(derive_key('POST', '/a', b'one'), derive_key('POST', '/a', b'two'))

    def test_method_and_path_are_part_of_the_key(self):
        self.assertNotEqual(derive_key('GET', '/a'), derive_key('HEAD', '/a'))
        self.assertNotEqual(derive_key('GET', '/a'), derive_key('GET', '/a?'))


@ddt
class TestKeyFor(TestCase):
    @data('POST', 'PUT', 'PATCH')
    def test_body_methods_include_the_digest(self, method):
        request = Request(method=method, path='/a', body=b'payload')
        self.assertEqual(derive_key(method, '/a', b'payload'), key_for(request))

    @data('POST', 'PUT', 'PATCH')
    def test_body_methods_without_a_body_digest_the_empty_body(self, method):
        request = Request(method=method, path='/a')
        self.assertEqual('{}|/a|{}'.format(method, EMPTY_DIGEST), key_for(request))

    @data('GET', 'HEAD', 'DELETE', 'OPTIONS')
    def test_other_methods_ignore_the_body(self, method):
        request = Request(method=method, path='/a', body=b'ignored')
        self.assertEqual('{}|/a'.format(method), key_for(request))
