import os
import sys
import traceback

import cherrypy
from dateutil import parser as date_parser

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../..'))

from lib.aut import compute_aut  # noqa: E402
from lib.location_store import validate_coordinates  # noqa: E402
from lib.rays import RAY_WINDOWS, classify_ray_window  # noqa: E402
from lib.timezone_utils import localize, now_in, resolve_timezone  # noqa: E402
from lib.utils import say  # noqa: E402
from lib.visualizer import AUTVisualizer  # noqa: E402

# Host configuration
PRODUCTION_FRONTEND = os.environ.get('AUT_FRONTEND_ORIGIN', '*')
DEV_FRONTEND = 'http://localhost:4000'


class AUTAPI:
    def __init__(self, dev_mode=False):
        self.dev_mode = dev_mode
        self.frontend_origin = DEV_FRONTEND if dev_mode else PRODUCTION_FRONTEND

    @cherrypy.expose
    @cherrypy.tools.json_out()
    def aut(self, lat, lon, time=None, tz=None):
        """GET /api/aut?lat=35.25&lon=-80.8&time=2025-06-21T23:50:00-04:00"""
        try:
            coords = validate_coordinates(lat, lon)
            if tz and resolve_timezone(tz) is None:
                raise ValueError(f'Unknown timezone: {tz}')

            if time:
                ts = localize(date_parser.parse(time), tz)
            else:
                ts = now_in(tz)

            result = compute_aut(ts, coords.lat, coords.lon)
            position = classify_ray_window(result.aut_hours)

            return AUTVisualizer.to_dict(result, position)
        except (ValueError, OverflowError) as e:
            say(f'API error for {lat}, {lon}: {type(e).__name__}: {str(e)}')
            traceback.print_exc()
            cherrypy.response.status = 400
            return {'error': str(e)}

    @cherrypy.expose
    @cherrypy.tools.json_out()
    def rays(self):
        """GET /api/rays"""
        return [
            {'index': i, 'name': r.name, 'start_hour': r.start_hour, 'end_hour': r.end_hour, 'tint': r.tint}
            for i, r in enumerate(RAY_WINDOWS)
        ]

    @cherrypy.expose
    @cherrypy.tools.json_out()
    def health(self):
        """GET /api/health"""
        return {'status': 'ok'}


def create_app(dev_mode=False):
    """Create and configure the CherryPy application"""
    api = AUTAPI(dev_mode=dev_mode)

    conf = {
        '/': {
            'tools.response_headers.on': True,
            'tools.response_headers.headers': [
                ('Access-Control-Allow-Origin', api.frontend_origin),
                ('Access-Control-Allow-Methods', 'GET, OPTIONS'),
                ('Access-Control-Allow-Headers', 'Content-Type'),
            ],
        }
    }

    return api, conf


_wsgi_app = None


# uwsgi entry point; the API is served under whatever prefix the proxy strips
def application(environ, start_response):
    global _wsgi_app
    if _wsgi_app is None:
        api, conf = create_app(dev_mode=False)
        cherrypy.config.update({
            'log.screen': True,
            'environment': 'production',
            'tools.proxy.on': True,
        })
        _wsgi_app = cherrypy.tree.mount(api, '/', conf)
    return _wsgi_app(environ, start_response)


if __name__ == '__main__':
    api, conf = create_app(dev_mode=True)
    port = int(os.environ.get('AUT_API_PORT', 5000))

    cherrypy.tree.mount(api, '/api', conf)
    cherrypy.config.update({
        'server.socket_host': '0.0.0.0',
        'server.socket_port': port,
    })

    say(f"Starting AUT API server in DEVELOPMENT mode on port {port}")

    cherrypy.engine.start()
    cherrypy.engine.block()
