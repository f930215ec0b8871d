"""
Services Module

Outbound adapters that are not tied to a single external API client:
- notifications: transactional email over SMTP
- shipping_label: printable PDF labels
"""
