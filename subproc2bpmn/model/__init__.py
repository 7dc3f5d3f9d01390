"""Process graph model"""
