from flask import Flask

from ttdbazaar.modules.catalog.routes import bp as catalog_bp
from ttdbazaar.modules.vendors.routes import bp as vendors_bp


def register_api_blueprints(app: Flask) -> None:
    app.register_blueprint(catalog_bp, url_prefix="/api")
    app.register_blueprint(vendors_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "TTD Bazaar API",
            "version": "0.1.0",
            "endpoints": {
                "catalog": [
                    "/products",
                    "/products/<id>",
                    "/products/<id>/reviews",
                    "/categories",
                    "/sort-options",
                ],
                "vendors": [
                    "/vendors",
                    "/vendors/<id>",
                    "/vendors/<id>/products",
                    "/vendors/<id>/products/<pid>/toggle",
                ],
            },
        }, 200
