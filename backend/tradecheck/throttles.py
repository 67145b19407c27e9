from rest_framework.throttling import ScopedRateThrottle


class TradecheckScopedRateThrottle(ScopedRateThrottle):
    def get_cache_key(self, request, view):
        token = (request.headers.get('X-API-Token') or '').strip()
        if not token:
            return super().get_cache_key(request, view)
        return self.cache_format % {
            'scope': self.scope,
            'ident': f'token:{token[:16]}',
        }
