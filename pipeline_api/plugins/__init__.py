"""Route plugins mounted by :func:`pipeline_api.main.create_app`."""
