from .listing_queries import ListingQueries

__all__ = ["ListingQueries"]
