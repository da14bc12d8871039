'''Interchangeable components of the tabulation process.'''
