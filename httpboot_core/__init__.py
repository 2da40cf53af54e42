"""
httpboot-core package

This package validates the network and deployment configuration of the
HTTP/TFTP boot server before it is deployed.
"""
