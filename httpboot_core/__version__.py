#  _     _   _         _                 _
# | |__ | |_| |_ _ __ | |__   ___   ___ | |_
# | '_ \| __| __| '_ \| '_ \ / _ \ / _ \| __|
# | | | | |_| |_| |_) | |_) | (_) | (_) | |_
# |_| |_|\__|\__| .__/|_.__/ \___/ \___/ \__|
#               |_|

__title__ = "httpboot_core"
__description__ = "configuration validation for the HTTP/TFTP boot server"
__url__ = "https://github.com/httpboot/httpboot-core"
__author__ = "httpboot maintainers"
__author_email__ = "maintainers@httpboot.dev"
__version__ = "1.0.0"
__status__ = "beta"
__license__ = "BSD-3-Clause"
__license_url__ = "https://opensource.org/licenses/BSD-3-Clause"
