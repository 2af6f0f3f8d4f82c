"""
Hosting Automator: Nginx & Wildcard SSL Setup
----------------------------------------------

Sets up a single server to host a root domain and any number of subdomains:

  • yourdomain.com       -> redirects to www.yourdomain.com
  • www.yourdomain.com   -> served from $HOME/SERVER/www/
  • *.yourdomain.com     -> served dynamically from $HOME/SERVER/subdomains/<name>/

The same tool rolls every change back with the uninstall action.
"""

APP_NAME = "Hosting Automator"
APP_SUBTITLE = "Nginx & Wildcard SSL"
VERSION = "1.0.0"
