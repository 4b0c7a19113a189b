"""
                        Services Module

Collaborators of the order API that sit outside the order store.

Services:
    - auth: staff passphrase validation
    - notifications: kitchen WhatsApp tickets (mock / Twilio)
    - billing: printable HTML bills
    - export: daily CSV export
"""
