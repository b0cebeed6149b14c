"""Storefront admin notification service.

Keeping this file makes ``storeadmin`` a regular package so an unrelated
distribution with the same name in site-packages cannot shadow it.
"""
