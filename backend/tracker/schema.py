# ============================================
# tracker/schema.py
# ============================================
"""
drf-spectacular extensions. The auth class is referenced by dotted path so
loading this module does not import it.
"""
from drf_spectacular.extensions import OpenApiAuthenticationExtension
from drf_spectacular.plumbing import build_bearer_security_scheme_object


class BearerTokenScheme(OpenApiAuthenticationExtension):
    target_class = 'tracker.authentication.BearerTokenAuthentication'
    name = 'BearerAuth'

    def get_security_definition(self, auto_schema):
        return build_bearer_security_scheme_object(
            header_name='AUTHORIZATION',
            token_prefix='Bearer',
            bearer_format='JWT',
        )
