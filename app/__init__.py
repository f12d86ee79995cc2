"""Push relay application package.

Watches the Realtime Database change feeds and relays new records as
push notifications.
"""
