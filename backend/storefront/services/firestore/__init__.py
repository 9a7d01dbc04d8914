"""Firestore REST client, typed-field codec and catalog collections."""
from storefront.services.firestore.client import FirestoreClient
from storefront.services.firestore.codec import decode, encode

__all__ = ["FirestoreClient", "decode", "encode"]
