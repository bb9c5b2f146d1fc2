"""
Service layer.

``product_store`` holds the persistence handle for the catalog and
``product_query`` builds the filtered, sorted and paginated listing
queries it runs.
"""
