"""
imghost: local upload service for image hosting on Cloudflare R2 and Aliyun OSS.
"""
__version__ = "0.1.0"
