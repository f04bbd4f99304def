"""Call Review Dashboard - AI call quality review service."""
