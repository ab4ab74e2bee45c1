"""nodebed command line interface"""
