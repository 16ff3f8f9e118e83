"""EasyEngine Random String Generator"""
import random
import string


class RANDOM:
    """Random strings generator"""

    def __init__(self):
        pass

    def long(self, length=24):
        """Alphanumeric string used for passwords"""
        rng = random.SystemRandom()
        return ''.join(rng.choice(string.ascii_letters + string.digits)
                       for n in range(length))

    def secret(self, length=32):
        """String with punctuation suitable for cookie secrets"""
        rng = random.SystemRandom()
        chars = string.ascii_letters + string.digits + '!#%&()*+,-.:;<=>?@[]^_{|}~'
        return ''.join(rng.choice(chars) for n in range(length))
