"""
Alert Relay - Chat Notification Channel

Relays check-state alerts from an alert-monitoring system into
Jabber/XMPP rooms and direct chats.
"""

__version__ = "0.1.0"
__author__ = "Alert Relay Team"
