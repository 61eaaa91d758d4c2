#!/usr/bin/env python3

import sys

import otpproto.cli


if __name__ == '__main__':
    sys.exit(otpproto.cli.dec_server())
