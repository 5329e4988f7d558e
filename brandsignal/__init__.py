"""Brand signal extraction engine.

Turns a website's raw markup into a SiteSignal: title, description, colors,
fonts, headings, body excerpt, logo, favicon and brand images, with every
remote asset rewritten to a same-origin proxied reference.
"""

from brandsignal.models.config import Config
from brandsignal.models.site_signal import SiteSignal
from brandsignal.services.signal_assembler import SiteAnalyzer, analyze_markup, analyze_site
from brandsignal.services.site_gateway import SiteFetchError

__all__ = [
    "Config",
    "SiteAnalyzer",
    "SiteFetchError",
    "SiteSignal",
    "analyze_markup",
    "analyze_site",
]
