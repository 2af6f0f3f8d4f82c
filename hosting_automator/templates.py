"""
Generated file contents: nginx server blocks, the Let's Encrypt TLS options,
placeholder index pages and the renewal reminder.

Nginx variables such as $host are written with a literal dollar sign, so the
templates use str.format with doubled braces where nginx needs them.
"""

from datetime import date

from hosting_automator.config import HostingConfig

OPTIONS_SSL_NGINX = """\
ssl_session_cache shared:le_nginx_SSL:10m;
ssl_session_timeout 1440m;
ssl_session_tickets off;
ssl_protocols TLSv1.2 TLSv1.3;
ssl_prefer_server_ciphers off;
ssl_ciphers "ECDHE-ECDSA-AES128-GCM-SHA256:ECDHE-RSA-AES128-GCM-SHA256:ECDHE-ECDSA-AES256-GCM-SHA384:ECDHE-RSA-AES256-GCM-SHA384:ECDHE-ECDSA-CHACHA20-POLY1305:ECDHE-RSA-CHACHA20-POLY1305:DHE-RSA-AES128-GCM-SHA256:DHE-RSA-AES256-GCM-SHA384";
"""

TEMPORARY_SITE = """\
server {{
    listen 80; listen [::]:80;
    server_name {domain} *.{domain};
    root /var/www/html;
    index index.html;
}}
"""

SSL_LINES = """\
    ssl_certificate {fullchain};
    ssl_certificate_key {privkey};
    include {options};
    ssl_dhparam {dhparams};"""

FINAL_SITE = """\
# Block 1: Redirects the apex domain to www (e.g., {domain} -> www.{domain})
server {{
    listen 443 ssl; listen [::]:443 ssl; http2 on;
    server_name {domain};

{ssl}

    return 301 https://www.{domain}$request_uri;
}}

# Block 2: Handles the www subdomain (e.g., www.{domain})
server {{
    listen 443 ssl; listen [::]:443 ssl; http2 on;
    server_name www.{domain};
    root {www_dir};
    index index.html;

{ssl}
}}

# Block 3: Dynamically handles all other subdomains (e.g., blog.{domain})
server {{
    listen 443 ssl; listen [::]:443 ssl; http2 on;
    server_name ~^(?!www\\.)(?<subdomain>.+)\\.{domain_regex}$;
    root {subdomains_dir}/$subdomain;
    index index.html;

{ssl}
}}

# Block 4: Redirects all HTTP traffic to HTTPS
server {{
    listen 80; listen [::]:80;
    server_name {domain} *.{domain};
    location / {{ return 301 https://$host$request_uri; }}
}}
"""

INDEX_PAGE = "<h1>{title} Works! (e.g., {url})</h1>\n"

RENEWAL_NOTE = """\
# =========================================================
# SSL Certificate Renewal Information for {domain}
# =========================================================

Certificate Created On:         {created}
Certificate Expires On:         {expires} (Latest renewal date)

Your wildcard certificate was issued with Certbot's manual DNS challenge.
It CANNOT be renewed automatically. Renew it MANUALLY before it expires
(about a week ahead is recommended). To renew, run:
  certbot certonly --manual --preferred-challenges=dns --force-renewal -d "{domain}" -d "*.{domain}"

Certbot will show a new TXT record to publish, just like the first time.

After renewing, reload Nginx to apply the new certificate:
  systemctl reload nginx

You can check the expiry date of the certificate with:
  openssl x509 -enddate -noout -in {cert}
"""

DATE_FORMAT = "%d.%m.%Y"


def render_temporary_site(domain: str) -> str:
    """Port-80 site that only exists so nginx is valid before the certificate."""
    return TEMPORARY_SITE.format(domain=domain)


def render_final_site(domain: str, config: HostingConfig) -> str:
    ssl = SSL_LINES.format(
        fullchain=config.fullchain(domain),
        privkey=config.privkey(domain),
        options=config.ssl_options_file,
        dhparams=config.dhparams_file,
    )
    return FINAL_SITE.format(
        domain=domain,
        domain_regex=domain.replace(".", r"\."),
        www_dir=config.www_dir,
        subdomains_dir=config.subdomains_dir,
        ssl=ssl,
    )


def render_index_page(title: str, url: str) -> str:
    return INDEX_PAGE.format(title=title, url=url)


def render_renewal_note(
    domain: str, created: date, expires: date, config: HostingConfig
) -> str:
    return RENEWAL_NOTE.format(
        domain=domain,
        created=created.strftime(DATE_FORMAT),
        expires=expires.strftime(DATE_FORMAT),
        cert=config.cert(domain),
    )
