"""camgi: render OpenShift must-gather snapshots as a single-page HTML report."""

__version__ = "0.3.0"

PROJECT_URL = "https://github.com/elmiko/camgi.rs"
